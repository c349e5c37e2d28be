"""
toolfs - filesystem operations backed by external tools.

Downloads (curl/wget), MD5 digests (md5sum/openssl/md5), directory
listings and shell commands, run against a logical current directory
that is tracked separately from the process working directory.
"""

__version__ = "0.1.0"
