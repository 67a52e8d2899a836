"""
Core Package

Models, schemas, errors and JSON parsing shared by the engine.
"""
