"""Roster data and the PokeAPI adapter."""
