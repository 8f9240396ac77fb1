"""
Structify: turn free text into JSON of a caller-supplied shape.
"""
