"""
Pydantic schemas and outcome enums for the warehouse drivers.
"""
