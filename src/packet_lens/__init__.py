"""Live packet-stream view model: bounded buffer, filtering and statistics."""
