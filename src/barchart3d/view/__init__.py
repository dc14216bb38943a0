"""
The VIEW layer draws RenderRequests with PyVista inside Qt widgets.
"""
