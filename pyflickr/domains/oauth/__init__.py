"""OAuth1 handshake and request signing."""
