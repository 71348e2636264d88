"""Service layer: the Pinata client and the batch upload orchestrator."""
