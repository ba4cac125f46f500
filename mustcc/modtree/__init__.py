"""Module-tree construction, scopes and import resolution."""