"""
Core business logic modules for PortfolioHub.

Submodules:
- matching: Project similarity scoring, ranking and recommendation
"""
