"""Text console for Healthcare Xpress. Run: python -m console"""
