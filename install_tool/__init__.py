"""
Multi-version tool installer: installs every manifest version of a tool side by
side and maintains version alias links.
"""

__version__ = "1.0.3"
