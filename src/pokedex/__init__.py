"""Pokédex: a PokéAPI catalog with memoized detail loading and evolution neighbors."""
