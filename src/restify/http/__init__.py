"""HTTP wire-level helpers: cookies, dates and well-known names."""
