"""Provider-agnostic building blocks: errors, logging, models, HTTP and streaming."""
