"""Infrastructure layer — adapters over message schema technologies."""
