"""System instructions sent to the generation model."""
