"""GraphQL documents and request helpers shared by the tests."""

CREATE_USER = """
mutation CreateUser($userInput: UserInputData!) {
  createUser(userInput: $userInput) { _id email name status }
}
"""

LOGIN = """
query Login($email: String!, $password: String!) {
  login(email: $email, password: $password) { token userId }
}
"""

POST_FIELDS = """
  _id title content imageUrl createdAt updatedAt
  creator { _id name }
"""

CREATE_POST = f"""
mutation CreatePost($postInput: PostInputData!) {{
  createPost(postInput: $postInput) {{ {POST_FIELDS} }}
}}
"""

UPDATE_POST = f"""
mutation UpdatePost($id: ID!, $postInput: PostInputData!) {{
  updatePost(id: $id, postInput: $postInput) {{ {POST_FIELDS} }}
}}
"""

DELETE_POST = """
mutation DeletePost($id: ID!) { deletePost(id: $id) }
"""

GET_POST = f"""
query GetPost($id: ID!) {{
  post(id: $id) {{ {POST_FIELDS} }}
}}
"""

LIST_POSTS = """
query Posts($page: Int) {
  posts(page: $page) { totalPosts posts { _id title createdAt creator { _id } } }
}
"""

GET_USER = """
query { user { _id name email status posts { _id title } } }
"""

UPDATE_STATUS = """
mutation UpdateStatus($status: String!) {
  updateStatus(status: $status) { _id status }
}
"""


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


def gql(client, query: str, variables: dict | None = None, headers: dict | None = None) -> dict:
    """POST a GraphQL operation and return the decoded body."""
    response = client.post(
        "/graphql", json={"query": query, "variables": variables or {}}, headers=headers or {}
    )
    assert response.status_code == 200
    return response.json()


def first_error(body: dict) -> dict:
    assert body.get("errors"), body
    return body["errors"][0]
