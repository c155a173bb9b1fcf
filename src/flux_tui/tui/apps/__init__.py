"""TUI applications package.

Available applications:
- flux: Flux resource dashboard
"""
