"""
Integration tests package.

Tests de integración contra SQLite in-memory (aiosqlite):
- Repositorios SQL: mapeo fila <-> entidad y UPDATE condicionales
- Flujo HTTP completo en modo SQL: reserva -> pipeline -> comisión

Para ejecutar solo tests de integración:
    pytest tests/integration/
"""
