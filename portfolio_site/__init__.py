"""
Portfolio site builder.

Renders a JSON content document into the portfolio page template:
biography, personal details, know-how, showcase, experience and education
sections, the GitHub language skills and the map widget key.

Entry point: `python -m portfolio_site build`.
"""

__version__ = "0.1.0"
