'''
Partnerboard Backend Test Suite

Test Modules:
-------------
- test_normalizer.py: Webhook row normalization
  - Canonical / accented / English key variants
  - Fail-soft coercion of numbers, dates and flags
  - Idempotence over model dumps

- test_table_view.py: Search, category, status and minimum-quotes filters,
  single-field sorting with direction toggle

- test_derived_views.py: Best / worst / dormant derivation and payload shapes

- test_formatting.py: Percentage rule, scores, display tones
- test_categories.py: Category grading, labels and distribution
- test_partner_detail.py: Detail panel summary

- test_partner_client.py: Webhook client error mapping
- test_session.py: Refresh busy flag and replace-on-success semantics

- test_password_policy.py: Password strength rules
- test_auth.py: Bearer token resolution
- test_mfa.py: MFA code generation, storage and delivery

- test_api.py: FastAPI routes through TestClient

Running Tests:
--------------
    pip install -e ".[test]"
    pytest partnerboard/tests/ -v

Configuration:
--------------
See conftest.py for shared fixtures and test configuration.
'''

__all__ = []
