"""
The MODEL layer contains pure data structures and layout math.
It has NO knowledge of the GUI (Qt) or the drawing surface.
It deals with world space, anchors, physical sizes and the zoom policy.
"""
