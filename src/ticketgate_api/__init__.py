"""Ticket scan, redemption and badge issuance API."""
