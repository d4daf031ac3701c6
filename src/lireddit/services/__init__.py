"""Business logic shared by the GraphQL resolvers and scripts."""
