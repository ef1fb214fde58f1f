"""
Test suite for the Compensated Summation Library.

Test Structure:
- test_eft.py: Tests for the error-free transformations
- test_numeric.py: Tests for the floating-point width abstraction
- test_core.py: Tests for the compensated accumulators
- test_algorithms.py: Tests for one-shot reductions and development baselines
- conftest.py: Shared fixtures and configuration

Usage:
    # Run all tests
    pytest

    # Run specific test file
    pytest tests/test_core.py

    # Run tests with coverage
    pytest --cov=compensated_summation

    # Run only fast tests
    pytest -m "not slow"

    # Skip hypothesis property-based tests
    pytest -m "not property"
"""
