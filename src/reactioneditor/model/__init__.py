"""
The MODEL layer contains pure data structures and the rules about them.
It has NO knowledge of the GUI (Qt) or the network.
It deals with the Reaction schema, enum lookup, emptiness and encoding.
"""
