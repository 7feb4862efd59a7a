"""SafeVoice Admin - backend for the harassment case dashboard."""
