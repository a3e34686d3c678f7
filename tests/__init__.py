"""
Test Suite for Bank Mirror

Test Structure:
- fixtures/: In-memory fakes for the source bank, ledger and checkpoint store
- unit/: Unit tests mirroring src/ package structure
- integration/: End-to-end sync and CLI tests

Test Categories:
- Core utilities (currency, dates, config)
- Source bank and ledger clients
- Sync engine (mirroring, classification, reconciliation, orchestration)

Test Data:
All test data uses synthetic financial information.
"""
