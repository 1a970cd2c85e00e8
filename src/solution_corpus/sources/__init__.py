"""Input side: everything that reads the problem tree.

- languages: extension -> language label
- problem_dir: `<id>.<title>` directory names
- metadata: README frontmatter / badges -> difficulty, tags, description
"""
