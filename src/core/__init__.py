"""Core domain package for hsconfig.

Core contains URL edit tracking, debouncing and validation reconciliation
without any HTTP or widget-specific code, keeping the form logic portable.
"""
