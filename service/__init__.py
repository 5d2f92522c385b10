"""
AgriDirect HTTP service
"""
