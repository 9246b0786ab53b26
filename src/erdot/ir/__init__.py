"""Intermediate representation of parsed ER markup."""
