"""
FinEase API Test Suite

- test_models.py: Transaction field validation and serialization
- test_query_engine.py: List options, filtering, sorting and paging
- test_aggregation.py: Month windows and report folding
- test_store.py: Connection pool lifecycle
- test_transactions.py: Transaction CRUD and owner summary endpoints
- test_reports.py: Monthly report endpoint
- test_errors.py: Error responses, logging and CORS headers

Run all tests:
    pytest tests/

Run with verbose output:
    pytest tests/ -v
"""
