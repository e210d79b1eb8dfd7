"""Types, states, validators and templates shared across flows."""
