"""Infrastructure layer: adapters for AWS and other technical concerns."""
