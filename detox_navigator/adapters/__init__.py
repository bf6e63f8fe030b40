"""Storage and clipboard mediums the core talks to through protocols."""
