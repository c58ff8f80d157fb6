"""Demo command line interface built with argnest."""
