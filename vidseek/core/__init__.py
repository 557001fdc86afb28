"""
Application shell for VidSeek.
"""
