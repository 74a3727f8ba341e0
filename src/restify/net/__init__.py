"""Transport: connections and TLS contexts."""
