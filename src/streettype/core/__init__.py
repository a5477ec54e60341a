"""Core building blocks shared by the asset pipeline and its interfaces."""
