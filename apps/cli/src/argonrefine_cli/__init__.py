"""Command line front end for argonrefine."""
