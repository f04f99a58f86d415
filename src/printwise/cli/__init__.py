"""Command-line front end for Printwise."""
