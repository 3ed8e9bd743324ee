"""
GraphQL operation documents used by the client and the integration tests.
"""

CREATE_USER = """
mutation($data: CreateUserInput!) {
  createUser(data: $data) {
    token
    user {
      id
      name
      email
    }
  }
}
"""

GET_USERS = """
query {
  users {
    id
    name
    email
  }
}
"""

LOGIN = """
mutation($data: LoginUserInput!) {
  login(data: $data) {
    token
  }
}
"""

GET_PROFILE = """
query {
  me {
    id
    name
    email
  }
}
"""

GET_POSTS = """
query {
  posts {
    id
    title
    body
    published
  }
}
"""

GET_MY_POSTS = """
query {
  myPosts {
    id
    title
    body
    published
  }
}
"""

GET_POST = """
query($id: ID!) {
  post(id: $id) {
    id
    title
    body
    published
    author {
      id
      name
    }
  }
}
"""

CREATE_POST = """
mutation($data: CreatePostInput!) {
  createPost(data: $data) {
    id
    title
    body
    published
  }
}
"""

UPDATE_POST = """
mutation($id: ID!, $data: UpdatePostInput!) {
  updatePost(id: $id, data: $data) {
    id
    title
    body
    published
  }
}
"""

DELETE_POST = """
mutation($id: ID!) {
  deletePost(id: $id) {
    id
    title
    body
    published
  }
}
"""

UPDATE_USER = """
mutation($data: UpdateUserInput!) {
  updateUser(data: $data) {
    id
    name
    email
  }
}
"""

DELETE_USER = """
mutation {
  deleteUser {
    id
    name
  }
}
"""
