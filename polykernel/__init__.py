"""
Integer-space 2D polygon kernel: construction with collinear elimination, bisector based
offsetting and vertex decimation.
"""

APPLICATION_NAME = "polykernel"
APPLICATION_VERSION = "0.3.0"
