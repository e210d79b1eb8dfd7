"""Intake flow tables, engine and router."""
