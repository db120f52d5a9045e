# HTTP blueprints package
