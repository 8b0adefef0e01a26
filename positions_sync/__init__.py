"""
positions-sync: mantiene la tabla positions alineada con un snapshot XML.

Operaciones disponibles:
- export: vuelca la tabla a un archivo XML.
- sync: sincroniza la tabla con el contenido de un archivo XML.
"""

__version__ = "1.0.0"
