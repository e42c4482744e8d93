"""
Token codec package.

- segments: splitting/joining the three base64url segments of a token.
- header: the fixed ``{"typ","alg"}`` header model.
- engine: encode and decode-and-verify pipelines over a signing binding.
- claims: registered claims and the expiration / not-before validators.

Nothing here reads a clock, logs, or touches key encodings.
"""
