"""OmniSearch terminal client."""
