"""
Test Configuration

Unit tests run against in-memory adapters (test/service/hotel_booking/in_memory_adapters.py)
and never need PostgreSQL or Redis. Integration tests (test/service/hotel_booking/integration)
run against PostgreSQL: pytest -m integration
"""

# Environment setup MUST happen before application modules read settings
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ.setdefault('POSTGRES_DB', 'hotel_booking_test_db')
    os.environ.setdefault('REDIS_KEY_PREFIX', 'test_')


_early_setup_test_environment()
