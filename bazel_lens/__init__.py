"""Editor code lenses for the targets declared in Bazel BUILD files."""
