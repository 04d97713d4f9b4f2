"""
Content persistence for the portfolio site.

Content records are read from and written to a remote relational database
when one is configured, with local key-value storage as the durable
fallback. A FastAPI app exposes the repositories over HTTP.
"""
