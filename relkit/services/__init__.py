"""Release pipeline services: discovery, build, changelog, publishing."""
