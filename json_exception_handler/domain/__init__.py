"""
Domain layer.

Error document models, sample failure kinds, cause-chain walking and
trace filtering. No framework imports beyond pydantic models.
"""
