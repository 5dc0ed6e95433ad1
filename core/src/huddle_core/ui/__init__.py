"""Server-rendered pages.

- /login posts the password to /api/auth from a small script
- / hosts the room list and the conferencing view driven by livekit-client in the browser
"""
