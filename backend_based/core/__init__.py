"""
Core cross-cutting pieces: domain exceptions shared by the classifier,
the data-source client and the CLI tools.
"""
