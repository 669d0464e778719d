"""Keep a workstation looking busy by nudging the pointer when it goes idle."""
