"""
Price token engine and content tools.
"""
