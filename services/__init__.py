"""
services/ - Business Logic Layer
================================
Caller-side rules that sit on top of the `Store` port: expiry computation
for fridge stock, filter validation and fridge/recipe matching.
"""
