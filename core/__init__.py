"""Bunpro review scheduling: SRS engine, storage and lesson generation."""
