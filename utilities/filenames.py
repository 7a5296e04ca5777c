"""Output filename helpers"""
import os

# Removed outright, never substituted
INVALID_CHARS = ['*', '?', '\\', '<', '>', ':', '"', '|', '/']


def strip_invalid_chars(name):
    for char in INVALID_CHARS:
        name = name.replace(char, '')
    return name


def output_filename(artist, title, audio_path):
    """Build "<artist> - <title><ext>" using the audio file's own extension"""
    ext = os.path.splitext(audio_path)[1].lower() or '.mp3'
    return f"{strip_invalid_chars(artist)} - {strip_invalid_chars(title)}{ext}"
