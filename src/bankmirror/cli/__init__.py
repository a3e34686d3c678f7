"""
Command Line Interface Package

Command Structure:
- bankmirror: Main entry point with utility commands (version, config)
- bankmirror sync: Run an incremental sync into the ledger
"""
