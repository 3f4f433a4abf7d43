"""
Test suite for taxtoken

Contains:
- tests/conftest.py : общие fixtures (ручные часы, router, токен с ликвидностью)
- tests/unit/       : unit и сценарные тесты модулей
"""
