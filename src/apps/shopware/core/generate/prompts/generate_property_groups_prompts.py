USER_PROMPT = """Create realistic sample data for {group_count} product property groups in JSON format that could describe the properties of products of the industry {category}.
Each property group needs a name, a short description, a displayType of either "text" or "color" and a list of fitting options.
Options of groups with the displayType "color" must carry a colorHexCode."""
