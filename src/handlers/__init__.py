"""Lambda entry points for issuing and redeeming image transfer URLs."""
