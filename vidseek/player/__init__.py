"""
Local playback for the selected video.

preview.py needs only moviepy; video_player.py also needs Tk and Pillow.
Import the one you need from its module.
"""
