"""Cross-cutting infrastructure: security, encryption, rate limiting, logging."""
