"""
The CONTROLLER layer talks to the outside world: the remote store, validator
and renderer, and the thread boundary between network workers and the GUI.
"""
