"""Build and run single-file Rust programs through a generated Cargo project."""

__version__ = "0.1.0"
