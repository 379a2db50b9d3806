"""
Adapters — thin wrappers around external tools (shell, git, HTTP).

Everything that touches the host or the network lives here so the
core can be tested by patching a single seam.
"""
