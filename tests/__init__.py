"""
Test Suite for Solar Generation Seeder

This module contains tests for:
- Baseline model (test_baseline.py)
- Anomaly config validation (test_validators.py)
- Fault rules and window matching (test_anomalies.py)
- Record sequencing (test_generator.py)
- Persistence layer (test_database.py)
- API endpoints (test_api.py)
- Seeding run (test_seed.py)

Run tests with:
    pytest tests/ -v
    pytest tests/ --cov=core --cov=engine --cov=api
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
