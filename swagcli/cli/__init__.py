"""
swagcli command line: the ``tofile`` command and its internal counterpart.
"""
