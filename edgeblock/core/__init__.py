# Core parsing and view building
