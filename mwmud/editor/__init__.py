"""Campaign editor tools: campaigns, areas and reference-id trees."""