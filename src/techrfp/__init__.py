"""Technology RFP finder."""
