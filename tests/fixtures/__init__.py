"""
Test Fixtures and Utilities

Shared test data and in-memory stand-ins for the source bank, the ledger and
the checkpoint file.

All test data is synthetic and does not contain real financial information.
"""
