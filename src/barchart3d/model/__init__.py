"""
The MODEL layer contains pure data structures and chart logic.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with bar geometry, chart options, click attribution and I/O.
"""
