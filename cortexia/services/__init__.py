"""
Services
========

Domain services, aggregation, scoring, insights and AI integration.
"""
