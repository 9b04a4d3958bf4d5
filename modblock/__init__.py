# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
modblock: module blocks for JavaScript, compiled ahead of time.

`modblock.blockc` is the compiler, `modblock.runtime` holds the runtime shim
and the Python model of a module block value.
"""
