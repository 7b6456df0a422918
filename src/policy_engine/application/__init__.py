"""Application layer – policy lifecycle use cases."""
