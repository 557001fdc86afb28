"""
Tkinter layout for VidSeek.
"""
