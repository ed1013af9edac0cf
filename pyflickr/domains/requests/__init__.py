"""Request pipeline: params, cache, transport and response normalization."""
