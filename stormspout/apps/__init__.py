"""Demo applications built on stormspout."""
