"""Client use cases: credential storage, session and ledger orchestration."""
