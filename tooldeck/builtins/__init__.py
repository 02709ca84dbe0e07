"""Tool modules shipped with tooldeck."""
