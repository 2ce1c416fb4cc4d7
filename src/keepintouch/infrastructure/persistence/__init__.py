"""Persistent adapters: Neo4j key-value storage and store-backed repositories."""
