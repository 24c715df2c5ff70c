"""
The VIEW layer owns everything Qt: the drawing surface, the compositor,
asset loading and the render loop widget.
"""
