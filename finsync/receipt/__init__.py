"""Pure receipt text parsing, classification and validation."""
