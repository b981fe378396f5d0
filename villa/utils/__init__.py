"""
Request helpers shared by the blueprints
"""
