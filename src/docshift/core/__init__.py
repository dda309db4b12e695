"""Pure path derivation and link rewriting."""
