"""Infrastructure layer: clocks, SQLite storage, repositories, composition root."""
