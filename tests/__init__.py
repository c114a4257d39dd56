# =============================================================================
# OPENSEA LISTING SYNC - TEST SUITE
# =============================================================================
#
# Structure:
#   tests/
#     unit/           - Unit Tests (extractors, normalizer, config, forwarder)
#     integration/    - Integration Tests (client, sync loop, CLI)
#     mock_data.py    - Raw order fixtures
#
# Usage:
#   pytest                     # Alle Tests
#   pytest tests/unit/         # Nur Unit Tests
#
# =============================================================================
