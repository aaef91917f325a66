"""Pure domain layer: document model and edit reconciliation."""
