"""GUI package: OpenCV highgui windows and design tokens.

Submodules:
- design_tokens: window geometry, trackbar labels, annotation styling
- windows: DiffWindows, the trackbar-driven front end
"""
