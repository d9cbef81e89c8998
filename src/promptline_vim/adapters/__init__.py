"""UI toolkit adapters for the modal engine."""
