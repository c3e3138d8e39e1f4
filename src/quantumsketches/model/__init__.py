"""
The MODEL layer contains pure data structures and physics.
It has NO knowledge of the GUI (Qt).
It deals with Geometry, Colours, Interference and Spin state.
"""
