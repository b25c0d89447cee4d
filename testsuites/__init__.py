"""
Test suites package.

Kept importable so the UI suite can import its page objects as
`testsuites.ui_testing.pages`:
  - unit/        framework tests against an in-memory driver
  - ui_testing/  page objects, demo site and browser-backed tests
"""
