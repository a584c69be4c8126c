# backend/xrayfix/core/__init__.py
