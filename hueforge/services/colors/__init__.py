"""
Color theory engine: candidate filtering, psychology-weighted scoring,
palette and harmony generation, text contrast and accessibility checks.
"""
