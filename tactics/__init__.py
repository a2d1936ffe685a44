"""
Grid Tactics - turowy silnik walki taktycznej na siatce.

Moduły:
- core: siatka, Dijkstra, selektor celów, RNG, konfiguracja
- units: jednostki i programy ataku
- army: armie i generator armii pod limit punktów
- combat: obliczanie obrażeń
- events: log bitwy
- simulation: pętla bitwy
"""

__version__ = "1.0.0"
