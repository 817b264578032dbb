"""
Core

Client configuration and the error taxonomy shared by every layer.
"""
